"""🧠 Доменний шар конвеєра імпорту."""
