"""Domain services: assessment, check-in, intervention, history."""
