"""Микросервис каталога товаров."""
