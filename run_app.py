"""Run Streamlit app from project root. Use: python run_app.py"""
import os
import subprocess
import sys

root = os.path.dirname(os.path.abspath(__file__))
env = dict(os.environ, PYTHONPATH=os.pathsep.join(p for p in (root, os.environ.get("PYTHONPATH")) if p))
subprocess.run([sys.executable, "-m", "streamlit", "run", os.path.join("near_resume", "app.py")], cwd=root, env=env, check=True)
