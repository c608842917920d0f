#!/usr/bin/env python3
"""
Launch script for the Resume Section Locator web UI
"""

import sys
import logging

from resume_sections.utils.logging import configure_logging


def main():
    """Launch the Resume Section Locator application"""
    configure_logging(verbose="--verbose" in sys.argv)
    try:
        print("📄 Starting Resume Section Locator...")
        print("  - Upload a resume PDF")
        print("  - Paste the matching resume JSON")
        print("  - Headings of every non-empty key are highlighted on the page")
        print("")

        from resume_sections.ui.app import build_ui

        demo = build_ui()

        print("🚀 Launching web interface...")
        print("📱 Open your browser to the URL that appears below")
        print("")

        # Launch with public sharing disabled
        demo.launch(
            server_name="127.0.0.1",  # Local only
            server_port=7860,         # Default Gradio port
            share=False,
            show_error=True,
            quiet=False,
        )

    except KeyboardInterrupt:
        print("\n👋 Goodbye! Application stopped by user.")
        sys.exit(0)
    except Exception as e:
        logging.exception("Failed to start application")
        print(f"❌ Error starting application: {e}")
        print("💡 Make sure the package is installed (pip install -e .)")
        sys.exit(1)


if __name__ == "__main__":
    main()
