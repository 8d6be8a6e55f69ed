"""Six Cities user data layer."""
