#!/usr/bin/env python3
"""
Internal Search Management Script

Wraps the Flask CLI commands for Doofinder internal search so they can be
run without remembering the FLASK_APP setup.
"""

import os
import sys
import subprocess


def run_command(args):
    """Run a flask CLI command and return whether it succeeded."""
    try:
        result = subprocess.run(
            ["flask", *args], check=True, capture_output=True, text=True
        )
        print(result.stdout)
        return True
    except subprocess.CalledProcessError as e:
        print(f"Error running command: {e}")
        print(f"Error output: {e.stderr}")
        return False


def print_usage():
    print("Internal Search Management Script")
    print("=" * 33)
    print("Usage:")
    print("  python manage_search.py status")
    print("  python manage_search.py search <term> [--page N] [--per-page N]")
    print("  python manage_search.py help")


def main():
    """Main function to handle internal search management."""

    if len(sys.argv) < 2:
        print_usage()
        return

    action = sys.argv[1].lower()

    os.environ["FLASK_APP"] = "main.setup:create_app"

    if action == "status":
        if not run_command(["doofinder-status"]):
            print("\n❌ Failed to read internal search settings.")

    elif action == "search":
        if len(sys.argv) < 3:
            print("A search term is required.")
            print_usage()
            return
        if not run_command(["doofinder-search", *sys.argv[2:]]):
            print("\n❌ Search failed. Check the credentials with 'status'.")

    elif action == "help":
        print_usage()
        print()
        print("status  - Show whether internal search is enabled per language")
        print("search  - Run a Doofinder-ranked search against local products")

    else:
        print(f"Unknown action: {action}")
        print("Run 'python manage_search.py help' for usage information.")


if __name__ == "__main__":
    main()
