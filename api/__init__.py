"""
Flood risk REST API
"""
