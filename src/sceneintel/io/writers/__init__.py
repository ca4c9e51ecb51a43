"""Result document writers."""
