#!/usr/bin/env python3
import sys
import os

# Lets a plain checkout run without installing the package
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from transindex.main import main

if __name__ == "__main__":
    main()
