# Task board: lane-partitioned tasks, drag-and-drop moves, and render filters.
#
# Components:
#   schema.py     - Data model (Task, Status, Lane, Category, FilterCriteria, BoardSnapshot)
#   store.py      - In-memory TaskBoard, the only owner of lane state
#   moves.py      - Drag-and-drop resolution and lane splicing
#   filters.py    - Category / due date / search filtering and board stats
#   validation.py - Task form validation and the attachment upload gate
#   ids.py        - Task id generators
#   events.py     - Change notifications for re-rendering
#   config.py     - YAML configuration
#   server.py     - Flask JSON API
