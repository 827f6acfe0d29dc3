"""Route construction, improvement and scheduling."""
