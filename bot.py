#!/usr/bin/env python3
"""
UYA Online Bot - Entry Point

Telegram bot that keeps a live "Players Online" message for the UYA server.
The actual implementation is in the uyabot package.
"""

if __name__ == "__main__":
    from uyabot import main
    main()
