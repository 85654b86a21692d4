# Fuzzmenu — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance for fuzzmenu.

Writes to stderr so that nothing leaks into pipes owned by the picker.
"""
from rich.console import Console

from fuzzmenu.themes import get_theme

console = Console(stderr=True, theme=get_theme())
