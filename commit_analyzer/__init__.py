"""
Git Commit Analyzer

Analyze staged git changes, suggest a commit message, keep a changelog.
"""

__version__ = "1.0.0"

# Commit types the composer can produce, in the order they are checked
COMMIT_TYPES = {
    'test': 'Adding or updating tests',
    'docs': 'Documentation only changes',
    'style': 'Formatting, whitespace, no code change',
    'refactor': 'Code restructuring without behavior change',
    'chore': 'Maintenance tasks, file removal, tooling',
    'feat': 'A new feature or capability',
    'fix': 'A bug fix',
}

COMMIT_TYPE_NAMES = list(COMMIT_TYPES.keys())

# Change pattern labels written into messages and the changelog
LARGE_REFACTOR = "大规模重构"
MEDIUM_CHANGE = "中等规模修改"
