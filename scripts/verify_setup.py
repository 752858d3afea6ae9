#!/usr/bin/env python3
"""
Verification script to check if autofix is properly set up.
This script checks:
1. Python version
2. Required dependencies
3. Node.js toolchain on PATH
4. Configuration file (optional autofix.yml)
5. API key access
"""

import importlib
import os
import shutil
import sys
from pathlib import Path

import yaml

# Define colors for terminal output
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
RESET = "\033[0m"
BOLD = "\033[1m"

KNOWN_SECTIONS = {"runner", "detection", "generation", "ui", "logging"}


def print_status(message, status, details=None):
    """Print a status message with color coding."""
    status_color = {
        "OK": GREEN,
        "WARNING": YELLOW,
        "ERROR": RED
    }.get(status, RESET)

    print(f"{message:<50} [{status_color}{status}{RESET}]")
    if details:
        print(f"  {details}")


def check_python_version():
    version = sys.version_info
    found = f"Found Python {version.major}.{version.minor}.{version.micro}"
    if version < (3, 10):
        print_status("Python version (3.10+ required)", "ERROR", found)
        return False
    print_status("Python version (3.10+ required)", "OK", found)
    return True


def check_dependencies():
    """Check if required dependencies are installed."""
    required_packages = ["yaml", "rich", "google.generativeai", "google.api_core"]

    all_ok = True
    for package in required_packages:
        try:
            importlib.import_module(package)
            print_status(f"Required package: {package}", "OK")
        except ImportError:
            print_status(f"Required package: {package}", "ERROR", "Not installed")
            all_ok = False
    return all_ok


def check_node_toolchain():
    """The supervised dev servers are almost always started through node or npm."""
    all_ok = True
    for tool in ("node", "npm"):
        location = shutil.which(tool)
        if location:
            print_status(f"Executable: {tool}", "OK", location)
        else:
            print_status(f"Executable: {tool}", "WARNING", "Not found on PATH")
            all_ok = False
    return all_ok


def load_user_config(config_path):
    if not config_path.exists():
        return {}
    with open(config_path, 'r') as f:
        return yaml.safe_load(f) or {}


def check_config_file(config_path):
    """Check that autofix.yml, if present, is valid."""
    if not config_path.exists():
        print_status("Configuration file", "OK", f"No {config_path.name}, defaults will be used")
        return True

    try:
        config = load_user_config(config_path)
    except yaml.YAMLError as e:
        print_status("Configuration file", "ERROR", f"Invalid YAML: {e}")
        return False

    if not isinstance(config, dict):
        print_status("Configuration file", "ERROR", "Top level must be a mapping")
        return False

    unknown_sections = sorted(set(config) - KNOWN_SECTIONS)
    if unknown_sections:
        print_status("Configuration file", "WARNING",
                     f"Unknown sections: {', '.join(unknown_sections)}")
        return False

    print_status("Configuration file", "OK", str(config_path))
    return True


def check_api_key(config_path):
    """Check if API key is available."""
    try:
        config = load_user_config(config_path)
    except yaml.YAMLError:
        return False

    generation = config.get("generation", {}) if isinstance(config, dict) else {}
    llm_provider = generation.get("llm_provider", "google_gemini")

    if llm_provider == "google_gemini":
        if generation.get("api_key") or os.environ.get("GOOGLE_API_KEY"):
            print_status("Google Gemini API key", "OK")
            return True
        print_status("Google Gemini API key", "ERROR", "Set the GOOGLE_API_KEY environment variable")
        return False

    if llm_provider == "mock":
        print_status("LLM API key", "OK", "Using mock LLM provider (no API key needed)")
        return True

    print_status("LLM provider", "WARNING", f"Unknown provider: {llm_provider}")
    return False


def main():
    """Run all verification checks against the current directory."""
    print(f"\n{BOLD}autofix Setup Verification{RESET}\n")

    config_path = Path.cwd() / "autofix.yml"
    results = [
        check_python_version(),
        check_dependencies(),
        check_node_toolchain(),
        check_config_file(config_path),
        check_api_key(config_path),
    ]

    print("\n" + "-" * 60)

    if all(results):
        print(f"\n{GREEN}{BOLD}All checks passed! autofix is ready to use.{RESET}\n")
        print("You can now run:")
        print("  autofix npm run dev           # Run and repair your dev server")
        print("  autofix --dry-run npm run dev # Only report detected errors")
    else:
        print(f"\n{YELLOW}{BOLD}Some checks failed. Please fix the issues above before using autofix.{RESET}\n")

    print("\n")
    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(main())
