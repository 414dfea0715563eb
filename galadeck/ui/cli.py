"""
Console entry point for the deck editor: ``galadeck-edit``.
"""

import sys
from pathlib import Path

from streamlit.web import cli as stcli


def main():
    editor = Path(__file__).with_name("editor_app.py")
    sys.argv = ["streamlit", "run", str(editor), *sys.argv[1:]]
    sys.exit(stcli.main())


if __name__ == "__main__":
    main()
