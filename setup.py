#!/usr/bin/env python3

import setuptools


def get_version():
    with open("debian/changelog", "r", encoding="utf-8") as f:
        return f.readline().split()[1][1:-1]


setuptools.setup(
    name="wb-bound-resolver",
    version=get_version(),
    description="Host name resolving through a DNS server reachable via a given network interface",
    license="MIT",
    maintainer="Wiren Board Team",
    maintainer_email="info@wirenboard.com",
    packages=["wb.bound_resolver"],
    install_requires=["dnspython"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["wb-bound-resolve = wb.bound_resolver.bound_resolve:main"]},
)
