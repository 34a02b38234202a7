from notes_api.main import run

run()
