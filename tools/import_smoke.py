import importlib
mods = [
  "bpscan.ocr.normalize",
  "bpscan.ocr.dates",
  "bpscan.ocr.clock",
  "bpscan.ocr.vitals",
  "bpscan.ocr.layout",
  "bpscan.ocr.vitals_bounds",
  "bpscan.engine.extract",
  "bpscan.headless",
]
for m in mods:
    importlib.import_module(m)
print("IMPORT_OK")
