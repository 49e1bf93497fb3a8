import os, sys
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from jwtgen.cli import main

if __name__ == "__main__":
    # Run straight from a checkout with `python main.py [flags]`.
    main()
