"""Equipment resolution for catalog exercises."""
