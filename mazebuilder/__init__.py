"""Maze builder — tower placement for tower-defense level design.

Stages, in order:

  maze     — load the map, build the grid, shortest-path searches
  builder  — search tower placements that maximise the shortest path
  web      — HTTP front end for the builder
"""
