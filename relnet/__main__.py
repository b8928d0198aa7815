"""Allow ``python -m relnet``."""

from relnet.app.cli import main

if __name__ == "__main__":
    main()
