"""
Core package — the query pipeline behind the research panels.
Contains: config settings, key management, prompt building,
          the Gemini gateway, and response normalization.
"""
