"""
pmswitch.translator — Rule-based command translation.

Exports:
    translate()        — rewrite a command for a target package manager
    PackageManager     — the closed set of supported managers
    TranslationEvent   — (original, translated) pair emitted per rewrite
"""

from pmswitch.translator.base import PackageManager, TranslationEvent, split_command
from pmswitch.translator.engine import (
    runner_command,
    translate,
    translate_package_manager,
    translate_runner,
    translate_subcommand,
)

__all__ = [
    "PackageManager",
    "TranslationEvent",
    "split_command",
    "translate",
    "translate_runner",
    "translate_package_manager",
    "translate_subcommand",
    "runner_command",
]
