"""
run_gallery.py: CLI Entry Point

This script serves as the command-line interface entry point for the
justified gallery. It forwards execution to the CLI logic defined in
`src/justified_gallery/gallery/cli.py`.

Usage:
    python run_gallery.py --images images.toml --container-width 1200 --html-out gallery.html

This wrapper allows you to run the tool directly without needing to
modify PYTHONPATH or install the project as a package.

For help on available options, run:
    python run_gallery.py --help
"""
import sys
# Source code in src/ subdirectory
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

import justified_gallery.gallery.cli as jg_cli

if __name__ == "__main__":
    sys.exit(jg_cli.main())
