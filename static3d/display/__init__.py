"""Display configuration, iframe partitioning, page templates and file output."""