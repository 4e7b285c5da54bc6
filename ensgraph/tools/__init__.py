"""
Command-line tools: activity cache busting and an edge store client.
"""
