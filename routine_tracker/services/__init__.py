"""Services - stateful владельцы данных для UI слоя."""
