#!/usr/bin/env python
"""
Command line entry point for the medsys project.  It points Django at
``medsys.settings`` and hands the arguments to the management utility,
so ``python manage.py migrate``, ``runserver`` and the project's own
commands (``ensure_demo_accounts``) all go through here.
"""
import os
import sys


def main() -> None:
    """Run administrative tasks for the medsys project."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'medsys.settings')
    try:
        from django.core.management import execute_from_command_line  # type: ignore
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Is it installed in the active "
            "virtual environment?"
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
