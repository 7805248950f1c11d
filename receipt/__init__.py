"""Receipt reconstruction: normalizers, ordering, classification and assembly."""
