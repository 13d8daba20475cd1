"""Business services: auth, users, operation logs, uploads, data scope."""
