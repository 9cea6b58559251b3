"""Platform backends for youup."""
