"""Full-screen textual front end."""
