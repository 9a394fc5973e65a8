"""
Central CLI entrypoint for classdebug.

Prints the declared fields, methods or constructors of a class, private
members included. The class comes from the running interpreter or from an
external Python file, directory or zip archive.

Usage:
    python main.py [--file PATH] [--target FIELDS|METHODS|CONSTRUCTORS] [--class NAME]
                   [--log-level LEVEL] [--log-file PATH]

Unrecognised options are ignored.

Examples:
    python main.py
    python main.py --class collections.OrderedDict --target METHODS
    python main.py --class json.decoder.JSONDecoder --target CONSTRUCTORS
    python main.py --file plugins/shapes.py --class shapes.Circle
"""

import os
import sys

# Add src/ to sys.path
sys.path.append(os.path.join(os.path.dirname(__file__), 'src'))

from classdebug.cli import main


if __name__ == "__main__":
    main()
