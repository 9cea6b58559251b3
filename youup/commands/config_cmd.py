"""Config command - shows the configuration path and creates a sample file."""

from __future__ import annotations

from pathlib import Path

from youup.config.loader import (
    config_path,
    create_sample_configuration,
    load_endpoints_configuration,
)
from youup.models.config_models import EndpointsConfiguration


def run_show_config(path: str | Path | None = None) -> int:
    """Show where the configuration lives and what it contains.

    Creates the sample configuration when the file does not exist yet.

    Args:
        path: Configuration file; defaults to the XDG path.

    Returns:
        Process exit code.
    """
    print("📋 Configuration Information")
    print()

    target = Path(path) if path else config_path()
    if target is None:
        print("❌ Cannot determine configuration directory path")
        return 1

    print("📁 Configuration file path:")
    print(f"   {target}")
    print()

    if target.exists():
        print("✅ Configuration file exists")
        _print_configuration(load_endpoints_configuration(target))
        return 0

    print("📝 Configuration file does not exist")
    print("   Creating sample configuration...")
    try:
        create_sample_configuration(target)
    except OSError as e:
        print(f"❌ Could not write {target}: {e}")
        return 1

    print("✅ Sample configuration created at:")
    print(f"   {target}")
    print()
    print("📖 Sample configuration contains:")
    _print_configuration(EndpointsConfiguration.default())
    print()
    print("💡 You can edit this file to customize the test endpoints and DNS domains")
    return 0


def _print_configuration(config: EndpointsConfiguration) -> None:
    print("🌐 Configured endpoints:")
    for endpoint in config.endpoints:
        print(f"   • {endpoint}")
    print("🔤 Configured DNS test domains:")
    for domain in config.dns_test_domains:
        print(f"   • {domain}")
