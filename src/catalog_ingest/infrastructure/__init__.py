"""🏗️ Інфраструктурний шар: браузер, троттлінг, парсери, оркестратор."""
