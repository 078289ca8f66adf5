#!/usr/bin/env python3
from notesite.cli import main

if __name__ == "__main__":
    main()
