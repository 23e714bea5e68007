"""Version 1 authentication router."""
