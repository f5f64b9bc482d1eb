"""Services — prompt construction and the language-model suggestion engine."""
