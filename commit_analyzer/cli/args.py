"""CLI Argument Parsing"""

import argparse
import argcomplete

from commit_analyzer import __version__
from commit_analyzer.llm import PROVIDERS


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='gca',
        description='Analyze staged changes, suggest a commit message, and commit interactively',
        epilog='Example: gca --changelog (also records the commit in CHANGELOG.md)'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Commit options
    parser.add_argument('-c', '--changelog', action='store_true', help='Record this commit in CHANGELOG.md')
    parser.add_argument('-n', '--no-verify', action='store_true', help='Skip pre-commit and commit-msg hooks')

    # Remote analysis options
    parser.add_argument('-p', '--provider', type=str, choices=PROVIDERS, help='Remote text-generation provider')
    parser.add_argument('-m', '--model', type=str, metavar='MODEL', help='Model name')
    parser.add_argument('--no-ai', action='store_true', help='Skip the remote analysis')
    parser.add_argument('--hint', type=str, metavar='TEXT', help='Add context for the remote model')

    # Output options
    parser.add_argument('--verbose', action='store_true', help='Show debug info (prompt size, changelog path)')
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')

    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
