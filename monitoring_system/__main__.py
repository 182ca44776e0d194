from monitoring_system.main import run

run()
