"""Allow ``python -m fashionhub_e2e``."""

from fashionhub_e2e.cli.main import main

if __name__ == "__main__":
    main()
