"""Widget data providers: battery, brightness, clock, cpu, disk, memory, network, volume, weather, workspaces."""