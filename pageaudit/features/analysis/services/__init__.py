"""
Analysis Services

Flow of one analysis run:

1. node_builder.py / head_markup.py - turn host input into Node objects
   - node_builder: canvas selections (camelCase dicts), optional flattening
   - head_markup: raw <head> markup parsed with BeautifulSoup

2. checkers/ - pure rule sets, one per category
   - each Checker.analyze(nodes) returns a list of Issues and touches nothing else
   - registration order in checkers/__init__.py is the order of result.issues

3. engine.py - runs the selected checkers, isolates failures, honours cancellation
   - cancellation.py: checkpoint() called between checkers

4. enrichment.py - optional, adds position and preview image from the host

5. scoring.py - per-category deductions and the weighted overall score
"""
