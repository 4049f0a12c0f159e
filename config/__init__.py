"""Конфигурация проекта Freight Order Parsing."""
