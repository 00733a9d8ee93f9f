"""Language server for Kaitai Struct schema files."""
