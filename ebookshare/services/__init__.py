"""Business logic for accounts and eBooks. Services raise ebookshare.core.errors types."""
