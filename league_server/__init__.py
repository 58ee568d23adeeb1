"""
League Server - win tracking service

Responsibilities:
- Record player wins
- Report a single player's win count
- List the league of all known players
- Pluggable score storage (memory, SQL, Redis)
"""
