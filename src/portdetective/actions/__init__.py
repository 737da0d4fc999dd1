"""Actions taken against a resolved process."""
