import sys

from git2pdf.cli import main

if __name__ == "__main__":
    sys.exit(main())
