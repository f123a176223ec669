"""
Main application entry point
Runs the No-Dues review service with the development server
"""

import os
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from nodues import create_app
from nodues.utils import log_info, log_error


def main():
    """Main application entry point"""
    print("=" * 50)
    print("🚀 Starting No-Dues Review Service")
    print("=" * 50)

    try:
        app = create_app()

        debug_mode = os.environ.get('FLASK_DEBUG', 'True').lower() in ['true', '1', 'on']
        port = int(os.environ.get('PORT', 5000))
        with app.app_context():
            log_info(f"Approvals service: {app.config['APPROVALS_API_BASE']}")
        print(f"🌐 Starting server on http://localhost:{port}")
        print(f"🔧 Debug mode: {'ON' if debug_mode else 'OFF'}")

        app.run(
            host='0.0.0.0',
            port=port,
            debug=debug_mode
        )
        return True

    except Exception as e:
        log_error("Failed to start application", e)
        print(f"❌ Failed to start application: {e}")
        return False


if __name__ == '__main__':
    success = main()
    if not success:
        sys.exit(1)
