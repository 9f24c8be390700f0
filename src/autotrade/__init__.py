"""autotrade — ядро торгового агента: корзины, сборка и оценка офферов."""

__version__ = "0.4.0"
