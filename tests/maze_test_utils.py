from collections import deque

from maze_explorer.maze import Maze, MazeConfig, WallGrid, build_node_graph


def open_grid(width, height):
    """WallGrid with every interior wall cleared."""
    walls = WallGrid(width, height)
    for x in range(1, width):
        for z in range(height):
            walls.clear_vertical(x, z)
    for x in range(width):
        for z in range(1, height):
            walls.clear_horizontal(x, z)
    return walls


def maze_from_walls(walls, start, goal):
    """Hand-built Maze (no random pruning, no repair)."""
    graph = build_node_graph(walls)
    cfg = MazeConfig(width=walls.width, height=walls.height, seed=None)
    return Maze(config=cfg, walls=walls, graph=graph, start=start, goal=goal)


def bfs_distance(graph, start, goal):
    """Edge count of the shortest start->goal route, or None."""
    q = deque([start])
    dist = {start: 0}
    while q:
        cur = q.popleft()
        if cur == goal:
            return dist[cur]
        for nb in graph.neighbors(cur):
            if nb not in dist:
                dist[nb] = dist[cur] + 1
                q.append(nb)
    return None


def is_neighbor_chain(graph, path):
    return all(graph.are_neighbors(a, b) for a, b in zip(path, path[1:]))
