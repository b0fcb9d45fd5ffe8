"""Entry point: python3 -m ghi"""

from .cli import main

if __name__ == "__main__":
    main()
