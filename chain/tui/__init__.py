"""
Chain TUI - interactive task listing.

Architecture:
- views/: Textual screen/widget components
- app.py: Main application entry point

Selection and scrolling are decided by chain.navigation; the views only
draw what the navigation state says.
"""
