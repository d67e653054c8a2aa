"""Near résumé: rewrite uploaded résumés into the Near format and normalize them."""

__version__ = "0.1.0"
