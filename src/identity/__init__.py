"""Identity context: users, authentication and saved addresses."""
