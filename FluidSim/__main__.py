# -- FluidSim Module Entry Point -- #

'''
Allows running the headless sandbox with: python -m FluidSim

Sean Bowman [02/12/2026]
'''

from FluidSim.runner import main

main()
