#!/usr/bin/env python3
"""
Startup script for the AAROHAN eligibility service
"""
import subprocess
import sys
from pathlib import Path

ENV_TEMPLATE = """# MongoDB Configuration
MONGODB_URL=mongodb://localhost:27017
MONGODB_DB_NAME=aarohan_db

# OpenRouter API Configuration
OPENROUTER_API_KEY=your_openrouter_api_key_here
OPENROUTER_BASE_URL=https://openrouter.ai/api/v1
OPENROUTER_MODEL=google/gemini-2.0-flash-001
LLM_TIMEOUT_SECONDS=30

# Application Configuration
APP_NAME=AAROHAN API
DEBUG=true
LOG_LEVEL=INFO
CORS_ORIGINS=http://localhost:3000,http://localhost:5173

# Assistant and recommendations
SUMMARY_INTERVAL=10
RECOMMENDATIONS_USE_LLM=true
"""


def create_env_file():
    """Create .env file if it doesn't exist"""
    env_path = Path(".env")
    if not env_path.exists():
        print("📝 Creating .env file...")
        env_path.write_text(ENV_TEMPLATE)
        print("✅ .env file created successfully!")
        print("⚠️  Please edit .env file and add your OpenRouter API key")
    else:
        print("✅ .env file already exists")


def check_dependencies():
    """Check if required dependencies are installed"""
    print("🔍 Checking dependencies...")

    try:
        import fastapi
        import uvicorn
        import motor
        import httpx
        import bcrypt
        print("✅ All Python dependencies are installed")
        return True
    except ImportError as e:
        print(f"❌ Missing dependency: {e}")
        print("📦 Please install dependencies using: pip install -e .")
        return False


def run_tests():
    """Run the test suite"""
    print("🧪 Running tests...")

    result = subprocess.run([sys.executable, '-m', 'pytest', '-q'], capture_output=True, text=True)
    if result.returncode == 0:
        print("✅ Tests passed successfully")
        return True
    print(f"❌ Tests failed:\n{result.stdout[-2000:]}")
    return False


def start_application():
    """Start the FastAPI application"""
    print("🚀 Starting the application...")

    try:
        subprocess.run([
            sys.executable, '-m', 'uvicorn',
            'aarohan.main:app',
            '--host', '0.0.0.0',
            '--port', '8000',
            '--reload'
        ])
    except KeyboardInterrupt:
        print("\n👋 Application stopped by user")


def main():
    """Main startup function"""
    print("🏛️  AAROHAN - PM Internship Scheme Assistant")
    print("=" * 50)

    if not Path("aarohan").exists():
        print("❌ Please run this script from the repository root")
        sys.exit(1)

    create_env_file()

    if not check_dependencies():
        sys.exit(1)

    if not run_tests():
        print("\n⚠️  Some tests failed. The application may not work correctly.")

    print("\n📚 Next steps:")
    print("1. Edit .env file and add your OpenRouter API key")
    print("2. Make sure MongoDB is reachable at MONGODB_URL")
    print("3. Visit http://localhost:8000/docs for API documentation")

    response = input("\n🚀 Start the application now? (y/n): ").lower().strip()
    if response in ['y', 'yes']:
        start_application()
    else:
        print("\n💡 To start the application later, run:")
        print("   uvicorn aarohan.main:app --reload")


if __name__ == "__main__":
    main()
