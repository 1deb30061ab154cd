"""Trigger Diary: daily health logs, symptom trigger analysis and flare-up prediction."""
