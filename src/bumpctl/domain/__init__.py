"""Pure domain logic: manifest references, identities, and version rewriting."""
