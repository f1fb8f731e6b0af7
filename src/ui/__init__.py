"""NiceGUI interface - thin visualization layer over the transcript.

Responsibilities:
    - Chat bubbles rendered from the transcript store, updated in place
      while a reply streams
    - Typing indicator and disabled input while a turn is loading
    - Error toast when a turn fails
    - Profile avatar selection persisted in per-user storage

Contains no streaming logic. Delegates every turn to ChatOrchestrator.
"""
