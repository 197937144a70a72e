from catalog_sync.main import run

run()
