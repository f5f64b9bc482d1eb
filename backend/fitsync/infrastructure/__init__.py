"""Infrastructure — database sessions, logging, security primitives and the Anthropic client."""
