"""
Start the pairing gateway with uvicorn.

Reads HOST and PORT (default 8080) from the environment / .env file.
"""

import uvicorn

from pairing.config import settings

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Device Pairing Gateway")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print(f"   - Health Check:  GET  http://localhost:{settings.PORT}/health")
    print(f"   - Pair Device:   POST http://localhost:{settings.PORT}/api/pair")
    print(f"   - API Docs:           http://localhost:{settings.PORT}/docs")
    print()
    print("📝 Test with curl:")
    print(f'   curl -X POST "http://localhost:{settings.PORT}/api/pair" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"otp": "123456", "label": "Kitchen TV"}\'')
    print()
    if settings.missing_credentials():
        print("⚠️  Warning: NANOMID_EMAIL / NANOMID_PASSWORD are not set.")
        print("   Every pairing request will fail until you configure your .env file.")
        print()
    print("=" * 60)
    print(f"Starting server on http://{settings.HOST}:{settings.PORT}")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "pairing.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
