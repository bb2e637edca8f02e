"""Desktop simulator for the orbital scene."""
