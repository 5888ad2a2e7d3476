"""Species Atlas: animal speed charts and species catalogue editing."""
