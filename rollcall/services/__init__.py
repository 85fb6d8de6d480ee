"""Business logic: account registration, login and the credential store."""
