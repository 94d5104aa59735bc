"""Allow ``python -m feedback_classifier``."""

from feedback_classifier.cli import run

if __name__ == "__main__":
    run()
