"""Allow `python -m ncd`."""

from ncd.cli import main

if __name__ == "__main__":
    main()
