# -*- coding: utf-8 -*-
"""
Stress Test - Development server entry point
"""

import os

from stresstest import create_app

app = create_app()

if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))

    print("=" * 60)
    print("Stress Test - expected loss under country collateral shocks")
    print(f"Data directory: {app.config['DATA_DIR']}")
    print(f"Running on http://127.0.0.1:{port}")
    print("=" * 60)

    app.run(debug=True, host='127.0.0.1', port=port)
