"""Small helpers shared by cmdlets."""
