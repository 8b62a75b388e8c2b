"""Small formatting helpers shared by the shortcode modules."""
