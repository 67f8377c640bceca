"""Service layer: TMDB access, artwork and metadata repositories, prefetch."""
