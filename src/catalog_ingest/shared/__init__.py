"""🧰 Спільний шар: утиліти та метрики."""
