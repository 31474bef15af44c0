"""CLI Commands"""

import os

from commit_analyzer.config import ENV_OVERRIDES, load_config, get_config_path
from commit_analyzer.output import bold, dim, info


def display_config() -> int:
    """Display current configuration."""
    config = load_config().apply_env()
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .gcarc found)")

    overrides = {var: os.environ[var] for var in ENV_OVERRIDES if os.environ.get(var)}
    if overrides:
        print(f"  {dim('Environment overrides:')}")
        for var, value in overrides.items():
            print(f"    {var}={value}")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    provider:          {info(config.provider)}")
    print(f"    model:             {info(config.model or 'auto')}")
    print(f"    endpoint:          {info(config.endpoint or '-')}")
    print(f"    timeout:           {info(str(config.timeout))}")
    print(f"    update_changelog:  {info(str(config.update_changelog).lower())}")
    print(f"    no_verify:         {info(str(config.no_verify).lower())}")
    print(f"    max_file_display:  {info(str(config.max_file_display))}")

    print(f"\n  {dim('Config locations:')}")
    print("    Local:  .gcarc (in current directory)")
    print("    Global: ~/.gcarc\n")

    return 0
