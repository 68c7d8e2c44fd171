"""canvas-export — style-inlined page exports for Canvas import."""
