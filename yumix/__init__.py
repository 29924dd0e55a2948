"""YuMix notification and retention backend."""
