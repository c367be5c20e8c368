"""HTTP surface for the hls-queue transcoding service."""
