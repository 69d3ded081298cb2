"""
Red Alert Service

Access layer for Israel's Pikud Haoref (Home Front Command) alert feed:
rate-limited fetching of current and historical alerts, enrichment with a
static location gazetteer, and MCP / HTTP surfaces for the resulting tools.
"""

__version__ = "1.0.0"
__author__ = "Red Alert Service Team"
