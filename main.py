"""container-split — split a concatenated container log into one file per container."""

from container_split.cli import main

if __name__ == "__main__":
    main()
