"""CLI Main Entry Point"""

from commit_analyzer.changelog import ChangelogIoError, ChangelogRepository, CommitRecord
from commit_analyzer.config import Config, load_config
from commit_analyzer.git import (
    ChangeAnalysis, DiffInfo, DiffProcessor, GitAnalyzer, GitStatus, VcsQueryError, analyze_changes,
)
from commit_analyzer.llm import RemoteServiceError, get_client
from commit_analyzer.message import MessageComposer, first_line
from commit_analyzer.output import (
    bold, dim, info, print_step, print_success, print_error, print_warning, print_debug,
    colorize_commit_type, Spinner,
)
from commit_analyzer.prompts import PromptBuilder, PromptConfig

from commit_analyzer.cli.args import parse_args
from commit_analyzer.cli.commands import display_config
from commit_analyzer.cli.session import InteractiveSession, YES_ANSWERS
from commit_analyzer.cli.utils import clean_commit_message, edit_message

EDIT_ANSWERS = ('e', 'edit')


def _execute(description: str, action, *args) -> bool:
    """Run one git step with progress and success/failure markers."""
    print_step(description)
    try:
        action(*args)
    except VcsQueryError as e:
        print_error(f"{description} failed: {e}")
        return False
    print_success(f"{description} done")
    return True


def _ensure_staged(git: GitAnalyzer) -> GitStatus | None:
    """Return the status once something is staged, staging everything if needed."""
    status = git.get_status()
    if status.has_staged_changes:
        return status

    print(dim("No staged changes found, staging all changes..."))
    if not _execute("Staging all changes", git.stage, '.'):
        print_error("Could not stage changes, check 'git status'")
        return None

    status = git.get_status()
    if not status.has_staged_changes:
        print_error("Nothing to commit")
        return None
    return status


def _display_summary(diff: DiffInfo, analysis: ChangeAnalysis, max_shown: int) -> None:
    print(bold("Change summary:"))
    print(f"  Added files:    {len(diff.added_files)}")
    print(f"  Modified files: {len(diff.modified_files)}")
    print(f"  Deleted files:  {len(diff.deleted_files)}")
    print(f"  Lines:          +{diff.added_lines} -{diff.deleted_lines}")
    if analysis.change_pattern:
        print(f"  Pattern:        {analysis.change_pattern}")
    print(f"  Complexity:     {info(analysis.complexity.value)}")

    shown = diff.modified_files[:max_shown]
    for path in shown:
        print(dim(f"    {path}"))
    remaining = len(diff.modified_files) - len(shown)
    if remaining > 0:
        print(dim(f"    ... and {remaining} more files"))


def _display_message(message: str) -> None:
    """Display commit message between horizontal rules with colored type."""
    lines = colorize_commit_type(message).split('\n')
    width = max((len(line) for line in message.split('\n')), default=40)
    print(f"\n{bold('Suggested commit message:')}")
    print(dim('─' * width))
    print(bold(lines[0]))
    for line in lines[1:]:
        print(line)
    print(dim('─' * width))


def _query_remote_analysis(args, config: Config, diff: DiffInfo, analysis: ChangeAnalysis) -> str | None:
    """Ask the remote model for a commit line; any failure means no result."""
    if args.no_ai or config.provider == 'none':
        return None

    processed = DiffProcessor().process(diff)
    messages = PromptBuilder().build(processed, analysis, PromptConfig(hint=args.hint))

    try:
        client = get_client(
            provider=config.provider,
            model=config.model,
            endpoint=config.endpoint,
            timeout=config.timeout,
        )
        print(f"Asking {info(client.name)} for a commit message...")
        with Spinner():
            response = client.generate(messages)
    except RemoteServiceError as e:
        print_warning(f"Remote analysis unavailable: {e}")
        return None

    if args.verbose:
        prompt_chars = sum(len(m['content']) for m in messages)
        print_debug(f"Prompt: ~{prompt_chars // 4} tokens ({prompt_chars} chars)")
        print_debug(f"Response: {response.tokens_used} tokens from {response.model or 'endpoint'}")

    return first_line(clean_commit_message(response.content)) or None


def _update_changelog(git: GitAnalyzer, message: str, diff: DiffInfo,
                      analysis: ChangeAnalysis, remote_analysis: str | None, verbose: bool) -> None:
    """Record the commit in the changelog and stage it. Failures are not fatal."""
    print_step("Updating changelog")
    try:
        record = CommitRecord.from_analysis(
            message, diff, analysis,
            branch=git.current_branch(),
            commit_hash=git.last_commit_hash(),
            remote_analysis=remote_analysis,
        )
        path = ChangelogRepository(git.repo_root()).update(record)
    except (ChangelogIoError, VcsQueryError) as e:
        print_error(f"Could not update changelog: {e}")
        return

    print_success(f"Changelog updated: {path}")
    if verbose:
        print_debug(f"Inserted record '{record.subject}'")
    if not _execute("Staging changelog", git.stage, str(path)):
        print_warning("Add the changelog to the index manually")


def _commit_and_push(session: InteractiveSession, git: GitAnalyzer, message: str, no_verify: bool) -> int:
    answer = session.ask("\nCommit with this message? [y]es / [n]o / [e]dit: ")

    # Pick up anything changed since the analysis, including the changelog
    if not _execute("Staging all changes", git.stage, '.'):
        return 1

    if answer in EDIT_ANSWERS:
        edited = edit_message(message)
        if not edited:
            print_warning("Editor returned no message, commit cancelled")
            return 0
        message = edited
        answer = YES_ANSWERS[0]

    if answer not in YES_ANSWERS:
        print_warning("Commit cancelled")
        return 0

    if not _execute("Committing", git.commit, message, no_verify):
        return 1
    print_success("Commit created")

    if session.confirm("Push to remote? [y/n]: "):
        if _execute("Pushing", git.push):
            print_success("Pushed")
    else:
        print(dim("Push skipped"))
    return 0


def _run_commit_flow(args, config: Config, session: InteractiveSession, git: GitAnalyzer | None = None) -> int:
    """Main analyze, message, changelog, commit flow.

    Returns:
        int: Exit code
    """
    print(bold("Git Commit Analyzer\n"))

    try:
        git = git or GitAnalyzer()
        status = _ensure_staged(git)
        if status is None:
            return 1

        print(f"Branch: {info(status.branch)}")
        print(f"Last commit: {info(status.last_commit or '(none)')}\n")

        print_step("Analyzing staged changes")
        diff = git.get_diff_info()
    except VcsQueryError as e:
        print_error(str(e))
        return 1

    analysis = analyze_changes(diff)
    print_success("Analysis complete\n")

    remote_analysis = _query_remote_analysis(args, config, diff, analysis)
    message = MessageComposer().compose(diff, analysis, remote_analysis).message

    _display_summary(diff, analysis, config.max_file_display)
    _display_message(message)

    if config.update_changelog:
        _update_changelog(git, message, diff, analysis, remote_analysis, args.verbose)
    else:
        print(dim("\nChangelog update skipped (enable with --changelog)"))

    return _commit_and_push(session, git, message, config.no_verify)


def _apply_overrides(args, config: Config) -> Config:
    """CLI args > environment variables > config file."""
    config.apply_env()
    if args.provider:
        config.provider = args.provider
    if args.model:
        config.model = args.model
    if args.changelog:
        config.update_changelog = True
    if args.no_verify:
        config.no_verify = True
    return config


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)

    if args.display_config:
        return display_config()

    config = _apply_overrides(args, load_config())

    with InteractiveSession() as session:
        return _run_commit_flow(args, config, session)
