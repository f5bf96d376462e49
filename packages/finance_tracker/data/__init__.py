"""Package data: default keyword rule sets."""
