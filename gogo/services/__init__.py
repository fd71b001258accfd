"""
Services for gogo.

Execution services (filtering, process running, the engine and the loop
pipeline) live in the execution/ subpackage; command builders in commands/.
"""
