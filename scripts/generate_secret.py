"""
Gera o segredo de assinatura dos tokens em .secrets.toml.
Uso: uv run python scripts/generate_secret.py
"""

import secrets
from pathlib import Path


def main() -> None:
    path = Path(".secrets.toml")
    if path.exists():
        print("✗ .secrets.toml já existe — remova-o para gerar um novo segredo.")
        return

    path.write_text(f'[default]\nsecret_key = "{secrets.token_urlsafe(48)}"\n')
    print("✓ .secrets.toml gerado com sucesso.")


if __name__ == "__main__":
    main()
