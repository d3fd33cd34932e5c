"""Small pure helpers shared by translators."""
