"""
Database Manager - tabbed terminal dashboard.

Architecture:
- controller.py: UI state machine (tabs, popup stack, event fold)
- events.py: AppEvent types and the event bus
- providers.py: Tab / Popup protocols
- views/: tab and popup implementations plus Textual screens and widgets
- app.py: Textual application hosting the controller
- cli.py: command-line entry point

Extensibility points:
1. New tabs: implement the Tab protocol, add to views.tabs.default_tabs
2. New popups: implement the Popup protocol, add a PopupKind and open it
   from Controller._open_popup
3. New notifications: add an AppEvent variant and fold it in
   Controller.apply_event
"""
