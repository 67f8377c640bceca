"""AniArt command-line interface."""
