"""Content payload codec, embed allow-listing, tree helpers and renderer."""
