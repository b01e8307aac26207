"""
Arena - esports league API

Responsibilities:
- Entity CRUD (teams, players, referees, matches, awards)
- Cascading deletes and match-result bookkeeping
- Fixed analytical reports (top killers, semifinals, award winners, ...)
"""
