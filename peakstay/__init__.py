"""Peak Stay villa catalog and inquiry backend."""
