# cli.py

"""
Точка входа для запуска SiteMirror без установки пакета.

Пример запуска:
    python cli.py mirror https://example.com --root mirror --overwrite skip
"""
from site_mirror.cli import cli


if __name__ == "__main__":
    cli()
