"""Модели и конфигурация хранилища."""
