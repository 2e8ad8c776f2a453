from .snapshot import netstat, tcp, udp, tcp6, udp6
from .inode import resolve_owner, resolve_owners, build_inode_index
from .parser import parse_line, parse_lines
from .procfs import read_table
