"""crudgen -- Laravel CRUD scaffolding from a model name and a field list."""

__version__ = "0.1.0"
