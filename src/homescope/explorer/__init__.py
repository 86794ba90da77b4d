"""Directory listing, file reading and tree search."""
