"""
Command-line interface for text translation
"""
import sys

from deepl_translator.cli import main


if __name__ == "__main__":
    sys.exit(main())
