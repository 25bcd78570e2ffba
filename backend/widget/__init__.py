"""
Live Dota 2 matches widget job.
Polls OpenDota for live games in whitelisted leagues and updates a VK
community app widget with up to five scorelines.
"""
