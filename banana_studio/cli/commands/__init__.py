"""CLI команды.

Модули:
    init_cmd: banana init — создание banana.toml.
    config_cmd: banana config — просмотр и проверка конфигурации.
    doctor_cmd: banana doctor — диагностика.
    prompt_cmd: banana prompt — сборка промпта режима.
    key_cmd: banana key — проверка ключа и баланса.
    generate_cmd: banana generate — генерация со списанием кредитов.
"""

from banana_studio.cli.commands import init_cmd
from banana_studio.cli.commands import config_cmd
from banana_studio.cli.commands import doctor_cmd
from banana_studio.cli.commands import prompt_cmd
from banana_studio.cli.commands import key_cmd
from banana_studio.cli.commands import generate_cmd

__all__ = [
    "init_cmd",
    "config_cmd",
    "doctor_cmd",
    "prompt_cmd",
    "key_cmd",
    "generate_cmd",
]
