"""Schema types, a schema registry and field mappers."""