# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

from buildvariant.cli.main import main

main()
